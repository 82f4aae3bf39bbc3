"""Fixture records inserted by the seeder.

References between entities use symbolic keys (a username, a class name)
instead of numeric ids.  The seeding steps resolve them through the ids
returned by earlier steps.
"""

FIXTURE_PASSWORD = "password123"

USERS = [
    {
        "username": "owner",
        "email": "owner@seangkatan.com",
        "password": FIXTURE_PASSWORD,
        "role": "owner",
        "full_name": "System Owner",
        "phone": "081234567890",
    },
    {
        "username": "admin",
        "email": "admin@seangkatan.com",
        "password": FIXTURE_PASSWORD,
        "role": "school_admin",
        "full_name": "School Administrator",
        "phone": "081234567891",
    },
    {
        "username": "teacher1",
        "email": "teacher1@seangkatan.com",
        "password": FIXTURE_PASSWORD,
        "role": "teacher",
        "full_name": "Guru Matematika",
        "phone": "081234567892",
    },
    {
        "username": "teacher2",
        "email": "teacher2@seangkatan.com",
        "password": FIXTURE_PASSWORD,
        "role": "teacher",
        "full_name": "Guru Bahasa Indonesia",
        "phone": "081234567893",
    },
    {
        "username": "parent1",
        "email": "parent1@seangkatan.com",
        "password": FIXTURE_PASSWORD,
        "role": "parent",
        "full_name": "Orang Tua Siswa 1",
        "phone": "081234567894",
    },
    {
        "username": "student1",
        "email": "student1@seangkatan.com",
        "password": FIXTURE_PASSWORD,
        "role": "student",
        "full_name": "Siswa Pertama",
        "phone": "081234567895",
    },
    {
        "username": "student2",
        "email": "student2@seangkatan.com",
        "password": FIXTURE_PASSWORD,
        "role": "student",
        "full_name": "Siswa Kedua",
        "phone": "081234567896",
    },
]

CLASSES = [
    {"name": "Kelas 1A", "grade_level": "1", "academic_year": "2024/2025", "teacher": "teacher1"},
    {"name": "Kelas 1B", "grade_level": "1", "academic_year": "2024/2025", "teacher": "teacher2"},
    {"name": "Kelas 2A", "grade_level": "2", "academic_year": "2024/2025", "teacher": "teacher1"},
]

BADGES = [
    {
        "name": "Quiz Master",
        "description": "Menyelesaikan 10 quiz dengan skor minimal 80%",
        "icon": "🏆",
        "category": "achievement",
        "criteria_type": "quiz_count",
        "criteria_value": 10,
        "criteria_category": "all",
    },
    {
        "name": "Perfect Score",
        "description": "Mendapat skor 100% dalam quiz",
        "icon": "⭐",
        "category": "achievement",
        "criteria_type": "quiz_score",
        "criteria_value": 100,
        "criteria_category": "all",
    },
    {
        "name": "Math Genius",
        "description": "Menyelesaikan 5 quiz matematika dengan skor minimal 90%",
        "icon": "🧮",
        "category": "subject",
        "criteria_type": "quiz_count",
        "criteria_value": 5,
        "criteria_category": "math",
    },
    {
        "name": "Reading Champion",
        "description": "Menyelesaikan 5 quiz membaca dengan skor minimal 90%",
        "icon": "📚",
        "category": "subject",
        "criteria_type": "quiz_count",
        "criteria_value": 5,
        "criteria_category": "reading",
    },
]

STICKERS = [
    {
        "name": "Happy Face",
        "category": "emotions",
        "image_path": "/stickers/happy.png",
        "image_url": "/stickers/happy.png",
        "pack_name": "Basic Emotions",
        "description": "Stiker wajah bahagia",
    },
    {
        "name": "Thumbs Up",
        "category": "gestures",
        "image_path": "/stickers/thumbs-up.png",
        "image_url": "/stickers/thumbs-up.png",
        "pack_name": "Basic Gestures",
        "description": "Stiker jempol ke atas",
    },
    {
        "name": "Star",
        "category": "rewards",
        "image_path": "/stickers/star.png",
        "image_url": "/stickers/star.png",
        "pack_name": "Rewards",
        "description": "Stiker bintang",
    },
    {
        "name": "Heart",
        "category": "emotions",
        "image_path": "/stickers/heart.png",
        "image_url": "/stickers/heart.png",
        "pack_name": "Basic Emotions",
        "description": "Stiker hati",
    },
]

EVENTS = [
    {
        "title": "Pertemuan Orang Tua Kelas 1A",
        "description": "Pertemuan rutin orang tua siswa kelas 1A untuk membahas perkembangan anak",
        "type": "parent_meeting",
        "event_date": "2024-02-15",
        "start_time": "09:00:00",
        "end_time": "11:00:00",
        "location": "Ruang Kelas 1A",
        "created_by": "teacher1",
        "max_participants": 30,
        "class": "Kelas 1A",
    },
    {
        "title": "Lomba Matematika Antar Kelas",
        "description": "Kompetisi matematika untuk siswa kelas 1 dan 2",
        "type": "class_competition",
        "event_date": "2024-02-20",
        "start_time": "08:00:00",
        "end_time": "12:00:00",
        "location": "Aula Sekolah",
        "created_by": "admin",
        "max_participants": 50,
        "class": None,
    },
]

QUIZZES = [
    {
        "title": "Quiz Matematika Dasar",
        "description": "Quiz tentang penjumlahan dan pengurangan untuk kelas 1",
        "category": "math",
        "difficulty": "easy",
        "time_limit": 1800,  # seconds
        "created_by": "teacher1",
        "class": "Kelas 1A",
    },
    {
        "title": "Quiz Membaca Pemahaman",
        "description": "Quiz pemahaman bacaan sederhana untuk kelas 1",
        "category": "reading",
        "difficulty": "easy",
        "time_limit": 1200,
        "created_by": "teacher2",
        "class": "Kelas 1B",
    },
]

ALBUMS = [
    {
        "title": "Kegiatan Kelas 1A",
        "description": "Dokumentasi kegiatan belajar mengajar di kelas 1A",
        "class": "Kelas 1A",
        "created_by": "teacher1",
        "is_public": True,
        "allow_download": True,
        "tags": ["kelas1a", "belajar", "aktivitas"],
    },
    {
        "title": "Lomba Sekolah 2024",
        "description": "Dokumentasi berbagai lomba yang diadakan sekolah tahun 2024",
        "class": None,
        "created_by": "admin",
        "is_public": True,
        "allow_download": False,
        "tags": ["lomba", "2024", "kompetisi"],
    },
]

CHAT_ROOMS = [
    {
        "name": "Chat Kelas 1A",
        "type": "class_chat",
        "class": "Kelas 1A",
        "description": "Ruang chat untuk kelas 1A",
        "members": ["teacher1", "student1", "student2"],
        "moderators": ["teacher1"],
        "settings": {
            "allow_media": True,
            "allow_stickers": True,
            "moderation_enabled": True,
        },
        "created_by": "teacher1",
    },
    {
        "name": "Channel Orang Tua",
        "type": "parent_channel",
        "class": None,
        "description": "Channel komunikasi untuk orang tua siswa",
        "members": ["admin", "parent1"],
        "moderators": ["admin"],
        "settings": {
            "allow_media": True,
            "allow_stickers": False,
            "moderation_enabled": True,
        },
        "created_by": "admin",
    },
    {
        "name": "Ruang Guru",
        "type": "teacher_room",
        "class": None,
        "description": "Ruang diskusi khusus guru",
        "members": ["admin", "teacher1", "teacher2"],
        "moderators": ["admin"],
        "settings": {
            "allow_media": True,
            "allow_stickers": True,
            "moderation_enabled": False,
        },
        "created_by": "admin",
    },
]

# Records per table after a successful seed
FIXTURE_COUNTS = {
    "users": len(USERS),
    "classes": len(CLASSES),
    "badges": len(BADGES),
    "stickers": len(STICKERS),
    "events": len(EVENTS),
    "quizzes": len(QUIZZES),
    "albums": len(ALBUMS),
    "chat_rooms": len(CHAT_ROOMS),
}
