"""Fleet app: the club's yachts that members can book."""
