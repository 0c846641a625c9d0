"""Run ATP screening from a source checkout: python -m atp_screen REFINED_FOLDER"""

from .cli import main

if __name__ == "__main__":
    main()
