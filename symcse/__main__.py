from symcse.cli import main

main()
