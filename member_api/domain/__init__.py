"""Domain values shared by services and routers."""
