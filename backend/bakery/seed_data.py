# Overview: Default bakery catalog loaded by `flask catalog seed`.

DEFAULT_PRODUCTS = [
    {
        "name": "Pão Francês",
        "description": "Pãozinho tradicional brasileiro, crocante por fora e macio por dentro",
        "price": "0.75",
        "stock": 200,
        "rating": "4.8",
        "review_count": 156,
    },
    {
        "name": "Pão de Forma Integral",
        "description": "Pão de forma integral, nutritivo e saboroso. Fatias ideais para lanche",
        "price": "8.50",
        "stock": 50,
        "rating": "4.5",
        "review_count": 89,
    },
    {
        "name": "Pão de Açúcar",
        "description": "Pão doce tradicional, levemente adocicado e muito macio",
        "price": "1.25",
        "stock": 80,
        "rating": "4.7",
        "review_count": 124,
    },
    {
        "name": "Pão de Queijo",
        "description": "Autêntico pão de queijo mineiro, feito com polvilho e queijo",
        "price": "2.00",
        "stock": 150,
        "rating": "4.9",
        "review_count": 203,
    },
    {
        "name": "Bisnaguinha",
        "description": "Pãozinho doce pequeno, perfeito para o lanche escolar",
        "price": "0.60",
        "stock": 120,
        "rating": "4.6",
        "review_count": 98,
    },
    {
        "name": "Pão Italiano",
        "description": "Pão crocante com casca dourada e miolo aerado",
        "price": "2.50",
        "stock": 60,
        "rating": "4.4",
        "review_count": 67,
    },
    {
        "name": "Pão de Leite",
        "description": "Pão macio e levemente doce, feito com leite fresco",
        "price": "1.50",
        "stock": 90,
        "rating": "4.8",
        "review_count": 142,
    },
    {
        "name": "Pão Integral",
        "description": "Pão integral rico em fibras, ideal para uma alimentação saudável",
        "price": "1.75",
        "stock": 70,
        "rating": "4.3",
        "review_count": 85,
    },
    {
        "name": "Rosquinha Doce",
        "description": "Rosquinha tradicional levemente doce, perfeita para o café da manhã",
        "price": "1.00",
        "stock": 100,
        "rating": "4.7",
        "review_count": 118,
    },
    {
        "name": "Pão de Centeio",
        "description": "Pão escuro e nutritivo, feito com farinha de centeio",
        "price": "3.00",
        "stock": 40,
        "rating": "4.2",
        "review_count": 54,
    },
    {
        "name": "Croissant Simples",
        "description": "Croissant tradicional, folhado e amanteigado",
        "price": "4.50",
        "stock": 35,
        "rating": "4.6",
        "review_count": 76,
    },
    {
        "name": "Pão de Batata",
        "description": "Pão macio feito com batata, textura única e sabor suave",
        "price": "2.25",
        "stock": 55,
        "rating": "4.5",
        "review_count": 91,
    },
]
