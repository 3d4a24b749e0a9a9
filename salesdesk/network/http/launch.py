from salesdesk import setup

setup.run()

from salesdesk.network.http.server import server as http_server  # noqa: E402

# Called from the process manager which actually boots the server
server = http_server
