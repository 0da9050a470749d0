from delve.main import main

main()
