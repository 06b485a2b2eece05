# librarian/blocks/actions.py
"""Action ids shared by the view builders and the bot's listeners."""

BOOK_SEARCH_SUBMIT = "book_search_submit"
SHOW_HOME = "show_home"
OTHER_USERS_COLLECTION = "other_users_collection"

COLLECTION_ADD_ITEM = "collection_add_item"
COLLECTION_REMOVE_ITEM = "collection_remove_item"
COLLECTION_ITEM_UPDATE_RATING = "collection_item_update_rating"
COLLECTION_ITEM_UPDATE_LEND_OUT = "collection_item_update_lend_out"
COLLECTION_ITEM_FIND_LENDERS = "collection_item_find_lenders"
COLLECTION_ITEM_FIND_OTHER_RATINGS = "collection_item_find_other_ratings"
