"""Entry point for building the API documentation site."""

from docbuilder.build_docs import main

if __name__ == "__main__":
    raise SystemExit(main())
