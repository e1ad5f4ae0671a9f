from ansify.cli import main

raise SystemExit(main())
