from hotel_reservations.cli import main

if __name__ == "__main__":
    main()
