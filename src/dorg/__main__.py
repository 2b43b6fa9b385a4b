from dorg.core import main

main()
