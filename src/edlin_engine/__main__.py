from edlin_engine.cli import main

raise SystemExit(main())
