"""Trade persistence for tradestats."""
