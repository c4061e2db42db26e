"""
Service layer.

Services hold the validation and mutation rules for a domain and are
the only place that decides which error a client sees.  API handlers
stay thin and delegate here.
"""
