from pxweb_mcp.cli import run

run()
