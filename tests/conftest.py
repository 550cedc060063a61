"""Pytest configuration and fixtures."""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest


@pytest.fixture
def demo_workflow():
    """Minimal workflow with one node."""
    return {
        "name": "Demo",
        "nodes": [
            {"name": "Start", "type": "n8n-nodes-base.start", "parameters": {}}
        ]
    }


@pytest.fixture
def sample_workflow():
    """Workflow with nested parameters, arrays, settings and meta."""
    return {
        "name": "Customer Support Bot",
        "nodes": [
            {
                "id": "a1",
                "name": "Webhook",
                "type": "n8n-nodes-base.webhook",
                "position": [100, 200],
                "parameters": {
                    "path": "support",
                    "responseMessage": "Thanks, we received your request",
                    "httpMethod": "POST"
                }
            },
            {
                "id": "b2",
                "name": "AI Agent",
                "type": "@n8n/n8n-nodes-langchain.agent",
                "notes": "Answers customer questions",
                "position": [300, 200],
                "parameters": {
                    "options": {
                        "systemMessage": "You are a helpful assistant for {company}.",
                        "maxIterations": 5
                    },
                    "labels": ["Urgent", "Normal", ""],
                    "rules": [
                        {"label": "Refund", "value": "refund"},
                        {"label": "Other", "value": "other"}
                    ]
                }
            }
        ],
        "connections": {
            "Webhook": {"main": [[{"node": "AI Agent", "type": "main", "index": 0}]]}
        },
        "settings": {
            "executionOrder": "v1",
            "errorWorkflowDescription": "Notify the on-call engineer"
        },
        "meta": {"instanceId": "abc123", "version": "1.2"}
    }


@pytest.fixture
def memory_cache():
    """Private cache so tests never share entries through the process-wide one."""
    from flowloc.utils.cache import TranslationCache
    return TranslationCache()


class RecordingEngine:
    """Engine double that records every dispatched batch."""

    def __init__(self, name="google", batch_size=100, fail=False):
        self.name = name
        self.batch_size = batch_size
        self.fail = fail
        self.calls = []

    def is_available(self):
        return True

    async def translate(self, texts, target_lang, source_lang="en"):
        self.calls.append(list(texts))
        if self.fail:
            raise RuntimeError("upstream unavailable")
        return [f"{text}-{target_lang}" for text in texts]


@pytest.fixture
def recording_engine():
    return RecordingEngine()


@pytest.fixture
def make_engine():
    return RecordingEngine
