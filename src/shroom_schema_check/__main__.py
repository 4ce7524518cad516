from shroom_schema_check.cli import main

raise SystemExit(main())
