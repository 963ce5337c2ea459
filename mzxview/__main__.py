from mzxview.cli import main

main()
