from zcc.cli import main

raise SystemExit(main())
