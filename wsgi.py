"""WSGI entry point for the loan calculator application."""

import os
import sys

from loan_calculator import create_app

app = create_app()

if __name__ == "__main__":
    port = 5000

    # PORT is set by most PaaS hosts
    if "PORT" in os.environ:
        port = int(os.environ["PORT"])

    if len(sys.argv) > 2 and sys.argv[1] == "--port":
        port = int(sys.argv[2])

    app.run(debug=app.config["DEBUG"], host="0.0.0.0", port=port)
