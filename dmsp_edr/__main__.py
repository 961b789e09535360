from dmsp_edr.cli import main

raise SystemExit(main())
