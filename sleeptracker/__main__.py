from sleeptracker.app.main import main

raise SystemExit(main())
