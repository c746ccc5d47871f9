"""Terminal menu kiosk: browse a menu, order, and follow order status."""
