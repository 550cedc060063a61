"""Basic usage examples for FlowLoc."""

import json
import sys

from flowloc import (
    WorkflowTranslationPipeline,
    PipelineConfig,
    TranslatedText,
    scan,
    integrate
)
from flowloc.translation.orchestrator import TranslationOrchestrator

SAMPLE_WORKFLOW = {
    "name": "Sample Workflow",
    "nodes": [
        {
            "name": "Start",
            "type": "n8n-nodes-base.start",
            "position": [250, 300],
            "parameters": {}
        },
        {
            "name": "Edit Fields",
            "type": "n8n-nodes-base.set",
            "notes": "Prepare the greeting",
            "position": [450, 300],
            "parameters": {
                "values": {"string": [{"name": "greeting", "value": "Hello World"}]},
                "options": {"description": "Adds a test greeting"}
            }
        }
    ],
    "connections": {"Start": {"main": [[{"node": "Edit Fields", "type": "main", "index": 0}]]}},
    "settings": {"executionOrder": "v1"}
}


def example_1_scan():
    """Example 1: List translatable texts."""

    print("=" * 60)
    print("Example 1: Scan")
    print("=" * 60)

    result = scan(SAMPLE_WORKFLOW)
    for item in result.extracted_texts:
        print(f"{item.path_string:45} {item.original}")

    print(f"\n✓ {len(result.extracted_texts)} texts in {result.metadata['node_count']} nodes")


def example_2_pipeline():
    """Example 2: Translate a whole workflow (mock engine when no API key is set)."""

    print("\n" + "=" * 60)
    print("Example 2: Pipeline")
    print("=" * 60)

    pipeline = WorkflowTranslationPipeline(PipelineConfig(target_lang="ja", engine="google"))
    job = pipeline.run_sync(SAMPLE_WORKFLOW)

    print(f"Status: {job.status.value}")
    print(f"Engine used: {job.summary.get('resolved_engine')}")
    print(f"Average quality: {job.quality_score}")
    print(json.dumps(job.translated_document, ensure_ascii=False, indent=2))


def example_3_step_by_step():
    """Example 3: Scan, translate and integrate by hand."""

    print("\n" + "=" * 60)
    print("Example 3: Step by step")
    print("=" * 60)

    extracted = scan(SAMPLE_WORKFLOW).extracted_texts
    orchestrator = TranslationOrchestrator()
    translations = orchestrator.translate_sync([item.original for item in extracted], "fr")

    translated = [
        TranslatedText.from_extracted(item, text, "fr", "mock")
        for item, text in zip(extracted, translations)
    ]
    document = integrate(SAMPLE_WORKFLOW, translated)

    print(f"Workflow name: {document['name']}")
    print(f"Marker: {document['meta']}")


if __name__ == "__main__":
    if len(sys.argv) > 1:
        example_num = sys.argv[1]
        examples = {
            "1": example_1_scan,
            "2": example_2_pipeline,
            "3": example_3_step_by_step
        }

        if example_num in examples:
            examples[example_num]()
        else:
            print(f"Example {example_num} not found")
    else:
        print("Usage: python basic_usage.py <example_number>")
        print("\nAvailable examples:")
        print("  1 - Scan a workflow")
        print("  2 - Translate with the pipeline")
        print("  3 - Step-by-step translation")
