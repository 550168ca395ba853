"""Bar order memo: draft drink orders per visitor, then confirm them."""
