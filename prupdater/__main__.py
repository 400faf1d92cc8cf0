from prupdater.cli import main

raise SystemExit(main())
