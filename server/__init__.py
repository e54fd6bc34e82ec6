"""HTTP front end for playing Hearts."""
