pytest_plugins = ["reputation_gate.testing.conftest"]
