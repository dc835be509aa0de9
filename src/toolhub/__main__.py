from toolhub.cli import main

main()
