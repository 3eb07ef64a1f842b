pytest_plugins = ["jobmatchers.pytest_plugin", "pytester"]
