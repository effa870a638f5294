"""HTTP handlers behind the Azure Functions routes."""
