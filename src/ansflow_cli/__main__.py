from ansflow_cli import main

main()
