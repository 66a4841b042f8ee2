from passport_registry.config import load_config
from passport_registry.factory import create_app
from passport_registry.utils.logging_setup import setup_logging

config = load_config()
setup_logging(config.log_level, config.log_file)

app = create_app(config)

if __name__ == '__main__':
    # Port 5001 avoids the AirPlay receiver on macOS
    app.run(debug=True, port=5001)
