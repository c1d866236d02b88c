"""External adapters for the SimpleShop demo.

This package contains all external dependencies (SQLite, the filesystem,
clipboard commands, the terminal) and provides implementations of the
core port interfaces.

Adapter Organization:

- store/: Key-value store backends (SQLite, JSON file)
- export/: Sinks for the downloadable cart.json
- clipboard/: System clipboard access
- cli/: Interactive command shell
"""
