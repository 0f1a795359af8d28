from fsi_driver.cli import main

main()
