from pocketstore.cli.main import main

raise SystemExit(main())
