from ghmd.cli import main

main()
