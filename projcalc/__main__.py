from projcalc.cli import main

raise SystemExit(main())
