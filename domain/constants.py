"""
Static catalog data: menu, kits, delivery zones and pickup information.

Stock values here are defaults only; the stock table is authoritative and is
merged over them by the catalog store.
"""

from decimal import Decimal

from domain.catalog import DeliveryZone, KitDefinition, MenuItem

_IMAGE_BASE = "https://static.ifood-static.com.br/image/upload/t_medium/pratos/dabc25a4-58f9-43a9-a660-9c8f5125abfd"
_CATEGORY = "Marmitas PratoFit"

MENU_ITEMS = [
    MenuItem(
        id="1",
        title="Bobó de Frango",
        description="Cremoso bobó de frango feito com macaxeira fresca e leite de coco. Acompanha arroz branco soltinho.",
        serving="350g",
        image_url=f"{_IMAGE_BASE}/202402151100_03UX_i.jpg",
        category=_CATEGORY,
        tags=("Frango", "Cremoso"),
        stock=15,
    ),
    MenuItem(
        id="2",
        title="Escondidinho de Frango com Batata Doce",
        description="Purê aveludado de batata doce com recheio de frango desfiado temperado com ervas finas.",
        serving="350g",
        image_url=f"{_IMAGE_BASE}/202402151102_DY8N_i.jpg",
        category=_CATEGORY,
        tags=("Fit", "Low Carb"),
        stock=10,
    ),
    MenuItem(
        id="3",
        title="Escondidinho de Carne Moída",
        description="Clássico escondidinho com purê de batata inglesa e carne moída premium selecionada.",
        serving="350g",
        image_url="https://static-images.ifood.com.br/pratos/dabc25a4-58f9-43a9-a660-9c8f5125abfd/202406111535_CQYS_i.jpg",
        category=_CATEGORY,
        tags=("Carne",),
        stock=12,
    ),
    MenuItem(
        id="4",
        title="Espaguete a Bolonhesa",
        description="Massa grano duro com molho artesanal de tomate e carne moída suculenta.",
        serving="350g",
        image_url=f"{_IMAGE_BASE}/202402151118_Y3R3_i.jpg",
        category=_CATEGORY,
        tags=("Massa",),
        stock=10,
    ),
    MenuItem(
        id="5",
        title="Kibe de Forno",
        description="Kibe assado suculento, temperado com hortelã fresca e especiarias.",
        serving="350g",
        image_url=f"{_IMAGE_BASE}/202402151104_078B_i.jpg",
        category=_CATEGORY,
        tags=("Assado", "Proteico"),
        stock=15,
    ),
    MenuItem(
        id="6",
        title="Mexido à Mineira",
        description="Combinação saborosa de arroz, feijão, ovo mexido, couve e cubinhos de frango.",
        serving="350g",
        image_url=f"{_IMAGE_BASE}/202402151117_74F1_i.jpg",
        category=_CATEGORY,
        tags=("Completo",),
        stock=8,
    ),
    MenuItem(
        id="7",
        title="Rubacão Fit",
        description="Versão equilibrada com arroz integral, feijão fradinho, frango e queijo coalho.",
        serving="350g",
        image_url=f"{_IMAGE_BASE}/202402151114_55U2_i.jpg",
        category=_CATEGORY,
        tags=("Regional",),
        stock=10,
    ),
    MenuItem(
        id="9",
        title="Feijuca Fit",
        description="Feijoada leve com carnes magras, arroz branco e couve refogada.",
        serving="350g",
        image_url=f"{_IMAGE_BASE}/202402151107_IPNX_i.jpg",
        category=_CATEGORY,
        tags=("Tradicional",),
        stock=7,
    ),
    MenuItem(
        id="11",
        title="Galinhada Integral",
        description="Arroz integral com pedaços suculentos de frango ao molho de tomates frescos.",
        serving="350g",
        image_url="https://static-images.ifood.com.br/pratos/dabc25a4-58f9-43a9-a660-9c8f5125abfd/202402151110_KHY5_i.jpg",
        category=_CATEGORY,
        tags=("Integral",),
        stock=5,
    ),
]

KITS = [
    KitDefinition(
        id="unit",
        name="Unidade Avulsa",
        total_meals=1,
        price=Decimal("25.00"),
        price_per_meal=Decimal("25.00"),
        description="Ideal para experimentar",
    ),
    KitDefinition(
        id="kit5",
        name="Kit 5 Refeições",
        total_meals=5,
        price=Decimal("85.00"),
        price_per_meal=Decimal("17.00"),
        description="Garanta o almoço da semana",
        highlight=True,
    ),
    KitDefinition(
        id="kit10",
        name="Kit 10 Refeições",
        total_meals=10,
        price=Decimal("160.00"),
        price_per_meal=Decimal("16.00"),
        description="Praticidade para 15 dias",
    ),
    KitDefinition(
        id="kit20",
        name="Kit 20 Refeições",
        total_meals=20,
        price=Decimal("300.00"),
        price_per_meal=Decimal("15.00"),
        description="O melhor custo-benefício",
    ),
]

DELIVERY_ZONES = [
    DeliveryZone(
        label="Zona Sul/Leste (Próximos)",
        price=Decimal("7.00"),
        neighborhoods=(
            "Catolé", "Sandra Cavalcante", "Mirante", "Itararé", "Vila Cabral",
            "Jardim Paulistano", "Tambor", "Liberdade", "Cruzeiro",
        ),
    ),
    DeliveryZone(
        label="Zona Central/Norte",
        price=Decimal("9.00"),
        neighborhoods=(
            "Centro", "Prata", "São José", "Alto Branco", "Jardim Tavares",
            "Lauritzen", "Santo Antônio", "Monte Santo", "Universitário",
            "Bela Vista", "Estação Velha",
        ),
    ),
    DeliveryZone(
        label="Zonas Afastadas",
        price=Decimal("12.00"),
        neighborhoods=(
            "Malvinas", "Bodocongó", "Dinamérica", "Três Irmãs", "Serrotão",
            "Catingueira", "Velame", "Distrito Industrial", "Aluízio Campos",
            "Santa Rosa", "Bairro das Cidades",
        ),
    ),
]

PICKUP_INFO = {
    "address": "Rua Maria Minervina, 375 - Catolé",
    "city": "Campina Grande - PB",
    "hours": "Segunda a Sexta: 09h às 18h | Sábado: 09h às 13h",
    "maps_link": "https://www.google.com/maps/search/?api=1&query=PratoFit+Rua+Maria+Minervina",
}
