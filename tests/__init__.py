"""committer-core test suite.

- test_multiple_committers.py: dispatch order and failure propagation
- test_multiple_committers_config.py: YAML load/save of nested committers
- committers.py: recording and failing committers shared by the tests
"""
