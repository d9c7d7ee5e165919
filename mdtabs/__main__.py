from mdtabs.main import main

raise SystemExit(main())
