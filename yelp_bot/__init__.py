"""Watson Work bot that finds nearby restaurants through Yelp."""
