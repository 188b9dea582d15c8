"""
Core of typedconf.

- config: schemas, value coercion, the section store and configuration registries
- utils: logging and path helpers
"""
