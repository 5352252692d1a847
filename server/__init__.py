# HTTP backend for the tubesearch dashboard
