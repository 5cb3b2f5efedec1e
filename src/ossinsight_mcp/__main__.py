from ossinsight_mcp.cli.mcp_server import main

main()
