from archdispatch.cli.main import main

main()
