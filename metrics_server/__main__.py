from metrics_server.server import run

run()
