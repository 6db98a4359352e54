"""Console feature routers."""
