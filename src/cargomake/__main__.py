from cargomake.cli import main

main()
