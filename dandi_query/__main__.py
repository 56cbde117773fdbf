from dandi_query.scripts.run_server import main

main()
