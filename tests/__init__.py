"""
Test suite for typedconf.

Tests mirror the package layout:

- core/config/: coercion, schemas, section store, registries and exit hook
- core/utils/: logging and path helpers
- utils/: standalone helpers
- cli/: store inspection commands
- fixtures/: configuration types shared by the tests
"""
