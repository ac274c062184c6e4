"""Local development entrypoint.

Runs the Flask server and the draw scheduler in one process. The reloader is
off so the scheduler is not started twice.
"""

from lottery_live import create_app

app = create_app()


if __name__ == "__main__":
    app.run(host="127.0.0.1", port=8000, debug=False, use_reloader=False, threaded=True)
