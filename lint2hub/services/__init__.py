"""Services: diff parsing, GitHub access and comment posting."""
