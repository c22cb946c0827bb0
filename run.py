# /run.py
"""
Development entry point. In production serve ``run:app`` with a WSGI server.
"""
# Load environment variables from .env file
from dotenv import load_dotenv
load_dotenv()

# Now, import the app factory
from physiohub import create_app

# Create the app instance
app = create_app()

if __name__ == '__main__':
    port = app.config['PORT']
    app.logger.info(f"NHS PhysioHUB running at http://localhost:{port}{app.config['BASE_PATH'] or '/'}")
    app.run(host='0.0.0.0', port=port, debug=app.debug)
