from chatgpt_handoff.main import main

raise SystemExit(main())
