"""Package entry point for ``python -m schelm``.

WHY: Lets the splitter run without the console script installed, e.g.
``helm template ./chart | python -m schelm out/``.
"""

from schelm.cli import main

if __name__ == "__main__":
    main()
