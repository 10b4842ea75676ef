"""Admin panel support: an in-memory record store and display helpers for templates."""