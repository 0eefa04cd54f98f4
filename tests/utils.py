def tree_shape(steps):
    """Recursively reduce steps to (number, description, status) tuples."""
    return [
        (step.number, step.description, step.status.value, tree_shape(step.children))
        for step in steps
    ]


def open_nested(tracker, descriptions):
    """Open each description inside the previous one and return the steps."""
    return [tracker.open(description) for description in descriptions]
