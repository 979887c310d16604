from nsresolve.cli import main

main()
