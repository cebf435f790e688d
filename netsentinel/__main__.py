from netsentinel.cli import main

raise SystemExit(main())
