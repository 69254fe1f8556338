DEFAULTS = {
    # Cap on enumerated paths for shortest/longest (0 = unbounded)
    "TRAVERSAL_MAX_PATHS": 0,
    # Reject non-int edge weights
    "MUTATION_STRICT_WEIGHTS": True,
}
