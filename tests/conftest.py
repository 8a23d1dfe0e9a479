pytest_plugins = ["inmemfs._pytest_plugin"]
