"""Task list application: controllers, state and the console front end."""
