"""Enable `python -m faas_cli` invocation."""
from faas_cli import main


if __name__ == "__main__":
    main()
