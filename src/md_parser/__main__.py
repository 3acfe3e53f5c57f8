"""Allow ``python -m md_parser``."""

from md_parser.cli import main

raise SystemExit(main())
