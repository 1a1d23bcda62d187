from sequential_thinking.server import main

main()
