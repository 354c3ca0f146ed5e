MINIMUM_VOTER_AGE = 18
REQUIRED_VOTER_FIELDS = ("id", "name", "age")
