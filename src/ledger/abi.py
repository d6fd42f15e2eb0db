# static constants of the deployed ProductRegistry contract

# first deployment address on a fresh local development chain
DEFAULT_CONTRACT_ADDRESS = "0x5FbDB2315678afecb367f032d93F642f64180aa3"

_PRODUCT_COMPONENTS = [
    {"name": "id", "type": "uint256"},
    {"name": "name", "type": "string"},
    {"name": "category", "type": "string"},
    {"name": "dateOfHarvest", "type": "string"},
    {"name": "timeOfHarvest", "type": "string"},
    {"name": "farmLocation", "type": "string"},
    {"name": "qualityRating", "type": "string"},
    {"name": "pricePerUnit", "type": "uint256"},
    {"name": "description", "type": "string"},
    {"name": "farmer", "type": "address"},
    {"name": "isAvailable", "type": "bool"},
    {"name": "createdAt", "type": "uint256"},
]

CONTRACT_ABI = [
    {
        "inputs": [
            {"name": "name", "type": "string"},
            {"name": "category", "type": "string"},
            {"name": "dateOfHarvest", "type": "string"},
            {"name": "timeOfHarvest", "type": "string"},
            {"name": "farmLocation", "type": "string"},
            {"name": "qualityRating", "type": "string"},
            {"name": "pricePerUnit", "type": "uint256"},
            {"name": "description", "type": "string"},
        ],
        "name": "registerProduct",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
    {
        "inputs": [{"name": "id", "type": "uint256"}],
        "name": "getProduct",
        "outputs": [
            {
                "name": "",
                "type": "tuple",
                "components": _PRODUCT_COMPONENTS,
            }
        ],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "getAllProducts",
        "outputs": [
            {
                "name": "",
                "type": "tuple[]",
                "components": _PRODUCT_COMPONENTS,
            }
        ],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [{"name": "", "type": "uint256"}],
        "name": "products",
        "outputs": list(_PRODUCT_COMPONENTS),
        "stateMutability": "view",
        "type": "function",
    },
]
