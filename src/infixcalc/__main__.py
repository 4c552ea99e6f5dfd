from infixcalc.cli import main

main()
