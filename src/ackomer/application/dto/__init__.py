"""Request DTOs and response presenters shared by use cases and routers."""
