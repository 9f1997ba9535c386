"""Package entry point for ``python -m speed_reader``.

WHY: Users run the terminal reader as ``python -m speed_reader article.txt``
or ``python -m speed_reader --clipboard``. Python's ``-m`` flag looks for
``__main__.py`` inside the package and executes it.

HOW: Delegates to the CLI's main() function.
"""

from speed_reader.cli import main

if __name__ == "__main__":
    main()
