from plain_mcp.server import main

main()
