from ensgit.cli.app import main

main()
