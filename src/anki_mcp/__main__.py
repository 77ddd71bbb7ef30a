from anki_mcp.server import main

main()
