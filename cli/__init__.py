"""FlowLoc command line interface."""
