"""Pure game rules: mutations, prices, class weights and gacha."""
