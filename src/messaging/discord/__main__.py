"""Entry point for running the Discord bot as a module.

Allows running with: python -m src.messaging.discord
"""

from src.messaging.discord.bot import main

if __name__ == "__main__":
    main()
