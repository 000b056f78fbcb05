"""Audio cache for docvoice synthesis results."""
