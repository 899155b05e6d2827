from bracketry.cli import main

main()
