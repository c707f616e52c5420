from corde.app import main

main()
