"""Video publish service: staging, fast-start remux, orientation and object storage publish."""
