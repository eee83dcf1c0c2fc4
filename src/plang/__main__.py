from plang.cli.app import main

main()
