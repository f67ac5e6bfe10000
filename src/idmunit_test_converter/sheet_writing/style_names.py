"""Names of the cell styles the sheet writer applies."""

TITLE_STYLE = "idmunit-title"
DESCRIPTION_STYLE = "idmunit-description"
DELIMITER_STYLE = "idmunit-delimiter"
CONFIG_HEADER_STYLE = "idmunit-config-header"
ATTRIBUTE_HEADER_STYLE = "idmunit-attribute-header"
COMMENT_STYLE = "idmunit-comment"
BORDERED_STYLE = "idmunit-cell"
