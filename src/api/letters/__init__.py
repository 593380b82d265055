"""Letters bounded context: letter routing, replies, throws and thanks."""
