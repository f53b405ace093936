from hecto.cli import main

main()
