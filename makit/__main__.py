from makit.cli import main

raise SystemExit(main())
