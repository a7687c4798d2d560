# Load environment variables first
from dotenv import load_dotenv
load_dotenv()

import uvicorn

from storyhub.app import create_app
from storyhub.config import get_settings

app_settings = get_settings()
app = create_app(app_settings, configure_logging=True)

def run():
    uvicorn.run(
        "storyhub.main:app",
        host="0.0.0.0",
        port=3004,
        reload=app_settings.debug,
        log_level="info"
    )

if __name__ == "__main__":
    run()
