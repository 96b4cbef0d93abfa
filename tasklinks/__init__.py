"""Django app that renders links in task titles."""
