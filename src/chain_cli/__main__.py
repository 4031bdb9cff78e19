from chain_cli.app import main

main()
