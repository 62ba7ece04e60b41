"""Package entry point for ``python -m speech_metrics``.

WHY: Users run the engine as ``python -m speech_metrics result.json``.
Python's ``-m`` flag looks for ``__main__.py`` inside the package and
executes it.

HOW: Delegates to the CLI's main() function.
"""

from speech_metrics.cli import main

if __name__ == "__main__":
    main()
