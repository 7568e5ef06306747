from src.tracker.cli import main

main()
