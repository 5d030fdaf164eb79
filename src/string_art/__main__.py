from string_art import main

if __name__ == "__main__":
    main()
