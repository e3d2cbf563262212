from scratchgame.cli import main

raise SystemExit(main())
