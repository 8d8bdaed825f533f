# factory_ops/__main__.py
from factory_ops.main_app import main

main()
