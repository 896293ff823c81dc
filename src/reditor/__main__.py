from reditor.adapters.textual.app import main

if __name__ == "__main__":  # pragma: no cover - manual run
    main()
