"""Static reference lists, one per entity kind.

Order matters: the head of each list is what an empty query returns as
"popular" suggestions.
"""

from entity_suggest.entities import EntityKind

CUISINES: tuple[str, ...] = (
    "Italian",
    "Mexican",
    "Chinese",
    "Japanese",
    "Indian",
    "Thai",
    "French",
    "Greek",
    "Mediterranean",
    "American",
    "Korean",
    "Vietnamese",
    "Spanish",
    "Turkish",
    "Lebanese",
    "Moroccan",
    "Ethiopian",
    "Brazilian",
    "Peruvian",
    "British",
    "German",
    "Russian",
    "Caribbean",
    "Middle Eastern",
    "African",
    "Jamaican",
    "Cuban",
    "Argentinian",
    "Filipino",
    "Indonesian",
    "Malaysian",
    "Persian",
    "Portuguese",
    "Polish",
    "Hungarian",
    "Irish",
    "Scandinavian",
    "Cajun",
    "Creole",
    "Sichuan",
    "Cantonese",
    "Tex-Mex",
    "Hawaiian",
    "Nepalese",
    "Pakistani",
    "Sri Lankan",
    "Georgian",
    "Israeli",
    "Syrian",
    "Tunisian",
)

CHEFS: tuple[str, ...] = (
    "Gordon Ramsay",
    "Julia Child",
    "Anthony Bourdain",
    "Jamie Oliver",
    "Wolfgang Puck",
    "Bobby Flay",
    "Ina Garten",
    "Emeril Lagasse",
    "Thomas Keller",
    "Massimo Bottura",
    "Alain Ducasse",
    "Joël Robuchon",
    "Paul Bocuse",
    "Ferran Adrià",
    "René Redzepi",
    "Heston Blumenthal",
    "Nigella Lawson",
    "Yotam Ottolenghi",
    "José Andrés",
    "Marco Pierre White",
    "Daniel Boulud",
    "Jean-Georges Vongerichten",
    "Eric Ripert",
    "Grant Achatz",
    "David Chang",
    "Nobu Matsuhisa",
    "Masaharu Morimoto",
    "Rick Bayless",
    "Giada De Laurentiis",
    "Mario Batali",
    "Alice Waters",
    "Dominique Crenn",
    "Clare Smyth",
    "Hélène Darroze",
    "Anne-Sophie Pic",
    "Gastón Acurio",
    "Virgilio Martínez",
    "Alex Atala",
    "Dan Barber",
    "Marcus Samuelsson",
    "Vikas Khanna",
    "Sanjeev Kapoor",
    "Ken Hom",
    "Martin Yan",
    "Jiro Ono",
    "Nigel Slater",
    "Rachael Ray",
    "Guy Fieri",
    "Michel Roux",
    "Pierre Gagnaire",
)

DISHES: tuple[str, ...] = (
    "Pizza",
    "Spaghetti Carbonara",
    "Lasagna",
    "Risotto",
    "Sushi",
    "Ramen",
    "Pad Thai",
    "Tacos",
    "Burrito",
    "Paella",
    "Chicken Tikka Masala",
    "Butter Chicken",
    "Biryani",
    "Pho",
    "Banh Mi",
    "Bibimbap",
    "Kimchi Stew",
    "Peking Duck",
    "Dim Sum",
    "Kung Pao Chicken",
    "Beef Wellington",
    "Fish and Chips",
    "Shepherd's Pie",
    "Coq au Vin",
    "Beef Bourguignon",
    "Ratatouille",
    "Bouillabaisse",
    "Crème Brûlée",
    "Moussaka",
    "Souvlaki",
    "Falafel",
    "Hummus",
    "Shakshuka",
    "Tagine",
    "Couscous",
    "Jerk Chicken",
    "Ceviche",
    "Feijoada",
    "Empanadas",
    "Goulash",
    "Pierogi",
    "Schnitzel",
    "Gumbo",
    "Jambalaya",
    "Mac and Cheese",
    "Cheeseburger",
    "Caesar Salad",
    "Tiramisu",
    "Pizza Margherita",
    "Gnocchi",
)

INGREDIENTS: tuple[str, ...] = (
    "Garlic",
    "Onion",
    "Tomato",
    "Basil",
    "Olive Oil",
    "Butter",
    "Parmesan",
    "Mozzarella",
    "Chicken",
    "Beef",
    "Pork",
    "Salmon",
    "Shrimp",
    "Tofu",
    "Eggs",
    "Rice",
    "Pasta",
    "Potatoes",
    "Mushrooms",
    "Spinach",
    "Bell Pepper",
    "Chili Pepper",
    "Ginger",
    "Cilantro",
    "Parsley",
    "Thyme",
    "Rosemary",
    "Oregano",
    "Cumin",
    "Paprika",
    "Turmeric",
    "Cinnamon",
    "Soy Sauce",
    "Coconut Milk",
    "Lemon",
    "Lime",
    "Avocado",
    "Chickpeas",
    "Lentils",
    "Black Beans",
    "Feta",
    "Cheddar",
    "Yogurt",
    "Honey",
    "Maple Syrup",
    "Dark Chocolate",
    "Almonds",
    "Pecans",
    "Saffron",
    "Jalapeño",
)

RESTAURANTS: tuple[str, ...] = (
    "The French Laundry",
    "Noma",
    "Eleven Madison Park",
    "Osteria Francescana",
    "El Celler de Can Roca",
    "Per Se",
    "Alinea",
    "Le Bernardin",
    "Central",
    "Mirazur",
    "Gaggan",
    "Den",
    "Geranium",
    "Disfrutar",
    "Maido",
    "Pujol",
    "Atomix",
    "Sukiyabashi Jiro",
    "The Fat Duck",
    "Restaurant Gordon Ramsay",
    "Momofuku Noodle Bar",
    "Nobu",
    "Chez Panisse",
    "Katz's Delicatessen",
    "Peter Luger Steak House",
    "Joe's Pizza",
    "Shake Shack",
    "In-N-Out Burger",
    "Din Tai Fung",
    "Ippudo",
)

REFERENCE_LISTS: dict[EntityKind, tuple[str, ...]] = {
    EntityKind.CUISINE: CUISINES,
    EntityKind.CHEF: CHEFS,
    EntityKind.DISH: DISHES,
    EntityKind.INGREDIENT: INGREDIENTS,
    EntityKind.RESTAURANT: RESTAURANTS,
}
