from pl0lib.cli import main

raise SystemExit(main())
