# app/core/locales.py

# Сообщения об ошибках
ERROR_PRODUCT_NOT_FOUND = "Product not found."
ERROR_CATEGORY_NOT_FOUND = "Category not found."
ERROR_BRAND_NOT_FOUND = "Brand not found."
ERROR_BLOG_POST_NOT_FOUND = "Blog post not found."
ERROR_ORDER_NOT_FOUND = "Order not found."
ERROR_ITEM_NOT_IN_CART = "Item not found in cart."
ERROR_ITEM_NOT_SAVED = "Item not found in saved items."
ERROR_CART_EMPTY = "Your cart is empty. Add items before checking out."
ERROR_INVALID_COUPON = "Coupon code '{code}' is not valid."
ERROR_SLUG_TAKEN = "A record with slug '{slug}' already exists."
ERROR_INVALID_SLUG = "Could not build a URL slug from '{value}'. Use latin letters or digits."
ERROR_USERNAME_TAKEN = "Username already exists."
ERROR_EMAIL_TAKEN = "Email is already registered."
ERROR_ALREADY_SUBSCRIBED = "This email is already subscribed."
ERROR_INVALID_CREDENTIALS = "Incorrect username or password."
ERROR_INVALID_REQUEST = "Invalid request data."
ERROR_ADMIN_ONLY = "You do not have permission to access this resource."
ERROR_INTERNAL = "Internal Server Error."
