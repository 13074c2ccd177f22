from todolist.app.main import main

raise SystemExit(main())
