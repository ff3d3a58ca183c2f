from jominilint.cli import main

raise SystemExit(main())
