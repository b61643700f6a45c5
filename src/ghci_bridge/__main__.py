from ghci_bridge.cli import main

main()
