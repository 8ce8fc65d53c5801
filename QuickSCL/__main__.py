"""Allow running QuickSCL as a module: python -m QuickSCL."""

from .cli import main

raise SystemExit(main())
